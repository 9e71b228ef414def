"""
Catalog app settings, read from `settings.CATALOG_VARIATION_SELECT`.
"""

from django.conf import settings


DEFAULTS = {
    'NOTICE_SEPARATOR': '<br>',
    'SESSION_KEY_PREFIX': 'variation_select',
    # Bootstrap breakpoints, widest first
    'BREAKPOINTS': (
        ('xl', 1200),
        ('lg', 992),
        ('md', 768),
        ('sm', 576),
    ),
    'DEFAULT_BREAKPOINT': 'xs',
}


def get_setting(name):
    user_settings = getattr(settings, 'CATALOG_VARIATION_SELECT', None) or {}
    if name in user_settings:
        return user_settings[name]
    return DEFAULTS[name]
