#!/usr/bin/env python3
"""Example: Quickstart for path-scope

Minimal working example: build a scope, register a listener, and check
paths against it.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install path-scope
"""
from __future__ import annotations

import path_scope as ps


def main() -> None:
    print(f"path-scope version: {ps.__version__}")

    # Step 1: Create a scope and watch its changes
    scope = ps.Scope()
    listener = ps.RecordingListener()
    scope.listen(listener)

    # Step 2: Grant a workspace and carve out secrets
    scope.allow_directory("/workspace", recursive=True)
    scope.forbid_directory("/workspace/secrets", recursive=True)
    scope.allow_file("/etc/hostname")
    print(f"Scope ready: {len(scope.allowed_patterns())} allow patterns, "
          f"{len(scope.forbidden_patterns())} forbid patterns")

    # Step 3: Check paths
    paths = [
        "/workspace/src/app.py",
        "/workspace/secrets/key.pem",
        "/workspace/.env",
        "/etc/hostname",
        "/etc/passwd",
    ]
    print("\nScope decisions:")
    for path in paths:
        icon = "ALLOW" if scope.is_allowed(path) else "DENY"
        print(f"  [{icon}] {path}")

    # Step 4: Inspect the change log
    print(f"\nEvents: {len(listener)}")
    for event in listener.events:
        print(f"  {event.kind.value}: {event.path}")

    # Step 5: The same scope from configuration
    config = ps.ScopeConfigLoader().load_from_yaml_string(
        "allow:\n  - /workspace/**\ndeny:\n  - /workspace/secrets/**\n"
    )
    configured = ps.scope_from_config(config)
    print(f"\nConfigured scope allows app.py: "
          f"{configured.is_allowed('/workspace/src/app.py')}")


if __name__ == "__main__":
    main()
