"""Shared libraries for the model initializer injector.

Subpackages:
- ``libs.common``: configuration, logging, and metrics.
- ``libs.model_initializer``: pod template mutation that provisions model
  artifacts through an init container.

Usage:
- Import stable, reusable functionality from here to keep controller code lean.
"""
