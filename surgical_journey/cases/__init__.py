# -*- coding: utf-8 -*-
"""
Historical case dataset
"""

from .models import HistoricalCaseRecord
from .storage import CaseDataset

__all__ = [
    'HistoricalCaseRecord',
    'CaseDataset',
]
