# Routes package init
"""
Words API — API Routes Package
================================

Route Inventory:
    - words.py:   GET  /words   (list all words)
                  POST /words   (add a word)

Routes stay thin: parse the request, call the service, pick the status code.
"""
