"""
romdat - ROM DAT metadata converter

Reads and writes ClrMamePro and Logiqx DAT files, bridging them through a
format-agnostic internal metadata model.
"""

__version__ = "0.3.0"
