#!/usr/bin/env python
"""
Command-line entry point for the Personal Finance client.

Sets up the Django environment (settings, logging, session storage) and
runs management commands such as ``login``, ``transactions`` or
``convert``.
"""

import os
import sys


def main():
    """
    Run client commands.

    This function:
    1. Checks for DJANGO_SETTINGS_MODULE environment variable
    2. Sets a default if not specified
    3. Executes the command from the command line
    """
    settings_module = os.environ.get('DJANGO_SETTINGS_MODULE', 'core.settings.dev')
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', settings_module)

    try:
        from django.core.management import execute_from_command_line
    except ImportError as exc:
        raise ImportError(
            "Couldn't import Django. Are you sure it's installed and "
            "available on your PYTHONPATH environment variable? Did you "
            "forget to activate a virtual environment?"
        ) from exc

    execute_from_command_line(sys.argv)


if __name__ == '__main__':
    main()
