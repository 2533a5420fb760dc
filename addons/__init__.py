"""
addons/ - Bundled Add-ons
==========================
Modules listed in the ADDONS setting are imported at startup and their
``setup(context)`` function is called with the application context.
See ``commands.extensions``.
"""
