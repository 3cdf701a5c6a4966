# customer_api/validation/__init__.py
"""
Structural payload validation.

Two interchangeable strategies are provided, both returning a mapping of
field path -> messages:

- ``declarative``: constraints declared on the pydantic payload models
  (``customer_api.models``) and collected by ``DeclarativeValidator``.
- ``rules``: composable rule chains built with ``RuleSet.rule_for(...)``
  and run by ``RuleSetValidator``.

Use ``customer_api.validation.validators.get_validator`` to pick one.
"""
