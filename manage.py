#!/usr/bin/env python
"""
Command line entry point for the ultrasound reporting backend.

Points Django at ``sonoreport.settings`` unless ``DJANGO_SETTINGS_MODULE``
is already set, then runs the requested management command (``migrate``,
``runserver``, ``seed_data``, ``ensure_test_users`` ...).
"""
import os
import sys


def main() -> None:
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'sonoreport.settings')
    try:
        from django.core.management import execute_from_command_line  # type: ignore
    except ImportError as exc:
        raise ImportError(
            "Couldn't import Django. Is it installed in the active virtual environment?"
        ) from exc
    execute_from_command_line(sys.argv)


if __name__ == '__main__':
    main()
