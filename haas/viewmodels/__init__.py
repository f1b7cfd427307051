"""ViewModel package for UI state and command surfaces.

Call context:
    Controllers in ``haas.app`` own one instance of each viewmodel per view and
    write results into them; views only read.

Responsibilities:
    - Expose mutable UI state (loading flags, inline messages, form inputs).
    - Derive display text from domain objects.
    - Keep MVVM boundaries explicit by avoiding transport or persistence logic.
"""
