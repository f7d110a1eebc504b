"""HVACDesk - business records for HVAC service companies."""

__version__ = "0.1.0"
