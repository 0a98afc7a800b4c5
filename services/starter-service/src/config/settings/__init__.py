"""
Settings for Starter Service.

Select a module with DJANGO_SETTINGS_MODULE:
    config.settings.development
    config.settings.test
"""
