"""Tool framework: parameter schemas, command gateway, registry.

Each tool validates its arguments against a declared schema and
either answers locally or runs the ``stellar`` CLI and returns
its captured output.
"""
