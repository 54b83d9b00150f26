import django
import defusedxml
import pytest

from mediation import conf
from tests.utils import API_XML, VALIDATE_XML


def pytest_configure():
    print(f"Running with Django {django.__version__}, defusedxml {defusedxml.__version__}")
    print(
        "Using MEDIATION_ALLOW_TOP_LEVEL_MEDIATORS="
        f"{conf.MEDIATION_ALLOW_TOP_LEVEL_MEDIATORS}, "
        f"MEDIATION_STRICT_PROPERTY_ATTRIBUTES={conf.MEDIATION_STRICT_PROPERTY_ATTRIBUTES}"
    )


@pytest.fixture()
def validate_xml() -> str:
    """The inSequence of the 'validate' API, with nested properties."""
    return VALIDATE_XML


@pytest.fixture()
def api_xml() -> str:
    """A complete API definition, which uses many unsupported mediators."""
    return API_XML
