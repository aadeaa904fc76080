"""State/store layer.

This package is the single source of truth for the inventory state:
every change is an :class:`~equipstore.state.actions.Action` reduced
into a new immutable :class:`~equipstore.state.snapshot.EquipmentState`.
"""
