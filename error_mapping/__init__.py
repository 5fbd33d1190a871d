"""Provider Error Mapping.

Classifies raw error signals from payment and service providers
(code, description, state) into normalized failures:
- Ordered rules loaded once from JSON configuration
- First matching rule wins
- Reserved mappings raise undefined, unavailable or unexpected results
- Unclassifiable errors carry a header-safe reason
"""

__version__ = "0.1.0"
