"""Ultrasound reporting app.

This package contains the models, serializers, services, API views and
server-rendered pages used by doctors to manage patients and author
abdominal and carotid ultrasound reports.
"""
