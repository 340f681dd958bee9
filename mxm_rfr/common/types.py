"""
Shared typing utilities for mxm-rfr.

- `DateKey` is the canonical ``yyyymmdd`` identifier of a published release,
  always a month-end date (e.g. ``"20230331"``).
- `LinkIndex` maps DateKeys to the URL of the zip archive for that release.
- `LinkPredicate` is the pluggable acceptance test applied to candidate URLs.

Examples
--------
    index: LinkIndex = {
        "20230331": "https://www.eiopa.europa.eu/.../EIOPA_RFR_20230331.zip",
    }
"""

from __future__ import annotations

from typing import Callable, TypeAlias

DateKey: TypeAlias = str
LinkIndex: TypeAlias = dict[DateKey, str]
LinkPredicate: TypeAlias = Callable[[str], bool]

__all__ = ["DateKey", "LinkIndex", "LinkPredicate"]
