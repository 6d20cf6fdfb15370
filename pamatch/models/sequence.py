#!/usr/bin/env python3
"""
Sequence references and collections.

Query and subject sequences are addressed by 1-based integer ids into
their collection. Subject labels additionally carry the source genome
and the accession of the sequence.
"""
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Sequence, Tuple

from pamatch.exceptions import MalformedLabel, ValidationError


@dataclass(frozen=True)
class SequenceRef:
    """One sequence of a collection, addressed by a 1-based id"""
    id: int
    label: str
    sequence: str

    def __post_init__(self):
        if self.id < 1:
            raise ValidationError(f"Sequence ids are 1-based, got {self.id}", {'label': self.label})

    @property
    def length(self) -> int:
        return len(self.sequence)


@dataclass(frozen=True)
class SubjectLabel:
    """Genome identifier and accession parsed from a subject label"""
    genome_id: str
    accession: str

    @classmethod
    def parse(cls, label: str) -> 'SubjectLabel':
        """Split a label on whitespace; the first two tokens are genome id and accession.

        Raises:
            MalformedLabel: If fewer than two tokens are present
        """
        tokens = label.split()
        if len(tokens) < 2:
            raise MalformedLabel(f"Cannot parse genome id and accession from label: {label!r}",
                                 {'label': label})
        return cls(genome_id=tokens[0], accession=tokens[1])


@dataclass(frozen=True)
class SequenceCollection:
    """Ordered, named collection of sequences with stable 1-based ids"""
    name: str
    refs: Tuple[SequenceRef, ...] = ()
    _by_id: Dict[int, SequenceRef] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, 'refs', tuple(self.refs))
        index = {}
        for ref in self.refs:
            if ref.id in index:
                raise ValidationError(f"Duplicate sequence id {ref.id} in collection {self.name}",
                                      {'collection': self.name})
            index[ref.id] = ref
        object.__setattr__(self, '_by_id', index)

    @classmethod
    def from_pairs(cls, name: str, pairs: Iterable[Tuple[str, str]]) -> 'SequenceCollection':
        """Build a collection from (label, residues) pairs, numbering from 1"""
        refs = [SequenceRef(id=i, label=label, sequence=str(seq))
                for i, (label, seq) in enumerate(pairs, start=1)]
        return cls(name=name, refs=tuple(refs))

    @classmethod
    def combine(cls, collections: Sequence['SequenceCollection'], name: str = "subjects") -> 'SequenceCollection':
        """Concatenate collections into one, renumbering ids in order"""
        pairs = [(ref.label, ref.sequence) for coll in collections for ref in coll]
        return cls.from_pairs(name, pairs)

    def __len__(self) -> int:
        return len(self.refs)

    def __iter__(self) -> Iterator[SequenceRef]:
        return iter(self.refs)

    def __contains__(self, seq_id: int) -> bool:
        return seq_id in self._by_id

    def get(self, seq_id: int) -> SequenceRef:
        try:
            return self._by_id[seq_id]
        except KeyError:
            raise ValidationError(f"No sequence with id {seq_id} in collection {self.name}",
                                  {'collection': self.name, 'id': seq_id}) from None

    def length_of(self, seq_id: int) -> int:
        return self.get(seq_id).length

    @property
    def ids(self) -> List[int]:
        return [ref.id for ref in self.refs]

    @property
    def is_empty(self) -> bool:
        return not self.refs

    def subject_labels(self) -> Dict[int, SubjectLabel]:
        """Parse every label into (genome_id, accession), keyed by sequence id

        Raises:
            MalformedLabel: On the first label that does not parse
        """
        return {ref.id: SubjectLabel.parse(ref.label) for ref in self.refs}
