"""Inventory collection, summary, archiving and attachment selection."""

from hi_runner.api import InventoryConfig, InventoryPipeline, RunOutcome

__all__ = ["InventoryConfig", "InventoryPipeline", "RunOutcome"]
