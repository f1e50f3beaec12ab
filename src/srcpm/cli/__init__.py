"""Command-line front end for srcpm.

Parses the mode flags, wires the ``infra`` adapters into the ``core``
engines, and renders results and errors through Rich.  Nothing in
``core`` or ``infra`` imports from here.
"""
