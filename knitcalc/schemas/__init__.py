"""
Data contracts shared between the calculators and their callers.

Import from the submodules directly: warnings, resize, hammer_sleeve.
"""
