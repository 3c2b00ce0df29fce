"""Application layer: benchmark runner and the viewer controller."""
