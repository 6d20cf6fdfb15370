"""Command-line interface for pyPAMatch"""
