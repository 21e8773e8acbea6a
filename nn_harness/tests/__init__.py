"""
Copyright (c) 2025. All rights reserved.
"""

"""
Test suite for the integration harness.

Covers the expectation helpers, the case registry, the strict and lenient
runner, the command line, the MNIST reader, the reference models, the shared
training utilities, and the registered cases themselves.
"""
