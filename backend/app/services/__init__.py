# Services package init
"""
Pokedex Backend — Services Layer
=================================

Service Inventory:
    - JsonFileStore:   durable load/save of the collection (store.py)
    - PokemonService:  CRUD and pagination over the store (pokemon_service.py)
    - validation:      id parsing and payload shape checks (validation.py)
"""
