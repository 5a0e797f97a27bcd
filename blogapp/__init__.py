"""
BlogApp Client Core — Package Initializer
==========================================

What: Marks the `blogapp` directory as a Python package.
Who:  Imported by the composition root, the presentation layer and pytest.

Architecture Note:
    The client core follows a layered architecture, repeated per feature
    (auth, blog):

    ┌─────────────────────────────────────┐
    │      Blocs (State Containers)       │  ← events in, states out
    ├─────────────────────────────────────┤
    │             Use Cases               │  ← one call-through per operation
    ├─────────────────────────────────────┤
    │            Repositories             │  ← remote vs. local, errors → Failure
    ├─────────────────────────────────────┤
    │   Data Sources (Supabase, Cache)    │  ← thin adapters, raise app errors
    └─────────────────────────────────────┘

    Everything is assembled once in `blogapp.container` by constructor
    injection. Exceptions never cross the repository boundary; above it,
    results travel as `Either[Failure, T]` values.
"""

__version__ = "1.0.0"
