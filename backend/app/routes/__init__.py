# Routes package init
"""
Pokedex Backend — API Routes Package
=====================================

Route Inventory:
    - pokemon.py: GET/POST   /api/pokemon
                  GET/PUT/DELETE /api/pokemon/{id}
    - health.py:  GET /health, GET /

Routes stay thin: extract request data, call PokemonService, wrap the
result in an envelope. Failures are raised and rendered by the handlers
registered in main.py.
"""
