"""Language services: registry, prompt builders and the translation service.

Use explicit imports:
    from linguaflow.services.language.service import LanguageService
"""
