"""
Only the root tests/ directory carries an __init__.py, so that shared builders are
importable as `tests.helpers...`. Subdirectories are namespace packages (PEP 420);
test module names therefore have to stay unique across the tree.
"""
