"""DrawerZen - grid placement and packing engine for drawer bin layouts."""

__version__ = "0.1.0"
