"""Manage ARIN IRR AS-SET objects from RPSL/YAML definitions, with bgpq4 member flattening."""

__version__ = "0.1.0"
