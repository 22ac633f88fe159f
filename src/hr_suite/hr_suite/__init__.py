"""HR Suite package.

Organized by feature modules (recruitment, employees, leave, finance) with a
thin Flask controller layer over service facades, a keyed collection store and
one shared list-query pipeline.
"""
