# -*- coding: utf-8 -*-
"""
Surgical journey simulation backend

Matches a hypothetical patient against historical surgical cases, simulates
phase vital signs and an ECG trace, and derives an outcome for an educational
visualization. Not for clinical use.
"""

__version__ = "1.0.0"
