"""ElevateCV: AI-drafted CV builder and skill-gap analyzer."""

__version__ = "0.1.0"
