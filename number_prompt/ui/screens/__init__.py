"""Screens package"""
from . import number_input

__all__ = [
    'number_input',
]
