"""Per-pixel kernels and the executors that run them over image buffers."""
