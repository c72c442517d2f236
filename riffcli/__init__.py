"""Building blocks for Kubernetes-style command line tools: commands, flags, validation errors, colours, configuration and aligned columns."""

__version__ = "0.1.0"