"""stemforge core — configuration, manifest and the external build tooling."""
