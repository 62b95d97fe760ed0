"""Growth configuration defaults and presets.

Configs are plain dicts; ``grow`` fills any missing key from
``DEFAULT_GROWTH_CONFIG``.
"""

DEFAULT_GROWTH_CONFIG = {
    'max_iterations': 10,
    'max_order': None,
    'advance_generation': True,
    'skip_dirty_matches': False,
    'stop_on_quiescence': True,
    'record_fingerprints': True,
}

PRESET_MINIMAL = {
    **DEFAULT_GROWTH_CONFIG,
    'max_iterations': 1,
    'record_fingerprints': False,
}

PRESET_STANDARD = {
    **DEFAULT_GROWTH_CONFIG,
    'max_iterations': 25,
    'max_order': 500,
    'skip_dirty_matches': True,
}

PRESET_RESEARCH = {
    **DEFAULT_GROWTH_CONFIG,
    'max_iterations': 200,
    'max_order': 10000,
    'skip_dirty_matches': True,
    'stop_on_quiescence': False,
}

__all__ = [
    'DEFAULT_GROWTH_CONFIG',
    'PRESET_MINIMAL',
    'PRESET_STANDARD',
    'PRESET_RESEARCH',
]
