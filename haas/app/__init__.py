"""Application layer: controllers that orchestrate use cases into viewmodels."""
