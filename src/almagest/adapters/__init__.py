# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""File adapters for IERS Earth orientation data and SPICE leap-second kernels."""
from almagest.adapters.iers_csv import FinalsCsvError, load_finals_csv
from almagest.adapters.lsk import LeapSecondsKernelError, load_lsk, parse_lsk

__all__ = [
    "FinalsCsvError",
    "LeapSecondsKernelError",
    "load_finals_csv",
    "load_lsk",
    "parse_lsk",
]
