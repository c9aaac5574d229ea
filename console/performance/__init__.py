# Performance utilities: one fetch per resource per render cycle

from .data_loader import DataLoader

__all__ = ['DataLoader']
