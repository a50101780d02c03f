"""Infrastructure layer — manifest file, filesystem, processes, prompts.

This layer depends on stdlib, the domain layer, and third-party libs
(Click, Jinja2). It must never import from services, commands, or output.
"""
