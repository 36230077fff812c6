"""EdgeFinder: betting odds edges and multi-signal win probabilities."""

__version__ = "0.1.0"
