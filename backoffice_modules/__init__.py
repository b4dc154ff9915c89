"""
Back-office business modules.

Each sub-package is thin glue between the pure engines in
``backoffice_engines`` and the kernel infrastructure.
"""
