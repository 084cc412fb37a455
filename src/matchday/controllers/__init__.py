"""Controllers that turn actions into new tournament snapshots."""
