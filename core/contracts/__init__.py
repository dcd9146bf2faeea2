"""core.contracts

Stable interfaces (ABCs) between the feature packages and the platform.

- settings : string key-value persistence
- host     : windowing shell, window signals and run-at-startup registration

Features depend on these contracts, never on a concrete implementation.
This package contains only interfaces and shared type definitions.
"""
