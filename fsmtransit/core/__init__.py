"""
Core package: the transition engine and the machine that owns it.

Import order matters to avoid circular dependencies: events and errors have no
internal dependencies, transitions depend on events and order, and the state
machine sits on top of everything else.
"""
