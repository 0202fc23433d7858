"""PartyMap admin core: marker/polygon management against the PartyMap backend."""

__version__ = "0.1.0"
