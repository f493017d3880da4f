"""
Pokedex Backend — Application Package Initializer
=================================================

Layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns, envelopes
    ├─────────────────────────────────────┤
    │     Validation (ids, payloads)      │  ← runs before the service
    ├─────────────────────────────────────┤
    │      PokemonService (CRUD logic)    │  ← ids, pagination, merging
    ├─────────────────────────────────────┤
    │      JsonFileStore (Persistence)    │  ← one JSON array on disk
    └─────────────────────────────────────┘

The store is built once by create_app() and injected into the service;
nothing below the routes knows about HTTP.
"""

__version__ = "1.1.0"
