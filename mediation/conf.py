from django.conf import settings
from django.core.signals import setting_changed
from django.dispatch import receiver

_originals = {}

# -- grammar

# Whether mediators may appear outside an <inSequence> at the top level of the document.
# Disabling this restricts the top level to sequences only.
MEDIATION_ALLOW_TOP_LEVEL_MEDIATORS = getattr(settings, "MEDIATION_ALLOW_TOP_LEVEL_MEDIATORS", True)

# Whether <property> requires both the 'name' and 'value' attribute.
# By default, missing attributes are read as empty strings.
MEDIATION_STRICT_PROPERTY_ATTRIBUTES = getattr(
    settings, "MEDIATION_STRICT_PROPERTY_ATTRIBUTES", False
)

# -- output rendering

# Whether attribute values are escaped when rendering the syntax tree back to XML.
# Disabling this inserts the values literally.
MEDIATION_ESCAPE_ATTRIBUTES = getattr(settings, "MEDIATION_ESCAPE_ATTRIBUTES", True)


@receiver(setting_changed)
def _on_settings_change(setting, value, enter, **kwargs):
    if not setting.startswith("MEDIATION_"):
        return

    conf_module = globals()
    if value is None and not enter:
        # override_settings().disable() returns what the django settings module had.
        # Revert to our defaults here instead.
        value = _originals.get(setting)
    else:
        # Track defaults of this file for reverting to them
        _originals.setdefault(setting, conf_module[setting])

    conf_module[setting] = value
