"""In-memory runtime modules: a shared system with origins and events, and pallets for storage maps, sets, fixed-point accumulators, ring-buffer queues, randomness, currencies and crowdfunding."""

__version__ = "3.0.0"