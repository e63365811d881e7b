"""Monte Carlo experiments on binary Hopfield networks: stability, several stored patterns and storage capacity."""

__version__ = "0.1.0"