"""Float32 values, batch containers, layer parameter records and MNIST CSV loading."""

__version__ = "0.1.0"
__all__ = ["arithmetic", "data", "batch_ops", "container", "unit_params", "mnist"]