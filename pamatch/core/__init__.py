"""Core infrastructure: logging, application context, stream handling"""
