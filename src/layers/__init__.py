"""
Layers package - Input handling for the trace simulator.

Contains:
- Application layer (file loading, test data generation)
"""

from .application_layer import ApplicationLayer, TransferInfo, TestDataGenerator

__all__ = [
    'ApplicationLayer',
    'TransferInfo',
    'TestDataGenerator'
]
