"""Colour correction kernels, resolvers and executors."""
