"""Arch setup: sequential, idempotent workstation provisioning.

Core design goals:
- Every step probes first and skips work that is already done
- Dry run prints the exact commands a real run would execute
- Command tables are data (manifests/default.yaml), not code
- The pipeline, not the steps, decides when a failure is fatal
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
