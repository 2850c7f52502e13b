"""Tests for the model initializer injector.

This package contains unit tests for configuration, logging, metrics, URI
parsing, volume planning, credential config lookup and the injector itself.
No cluster is required: the Kubernetes API is mocked and credentials are
attached by fakes.
"""
