"""
scoregas test suite.

Tests for the parameter containers, priors, score-driven models, model
registry and configuration.
"""
