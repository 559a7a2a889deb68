"""
Injection engine — locate positions in text and edit them.

Leaves first: ``positions`` finds matching lines, ``insertion`` splices
payloads at them, ``injector`` applies one decoded Injection,
``document`` splits a rendered template into directive/body pairs, and
``generator`` runs the whole thing.
"""
