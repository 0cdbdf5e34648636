"""CLI commands for gtokenchecker.

Modules here register themselves with the main app on import; see
``gtokenchecker.cli.app``.
"""
