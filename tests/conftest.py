import os
import sys

import pytest

# Add the project root directory to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from imgproxy_url.services.imgproxy import Imgproxy

KEY_HEX = b"key".hex()
SALT_HEX = b"salt".hex()
SOURCE = "my/image.jpg"


@pytest.fixture
def signed_plain():
    """Signed configuration with a literal source path."""
    return Imgproxy(
        base_url="http://localhost",
        key=KEY_HEX,
        salt=SALT_HEX,
        signature_size=15,
        encode_path=False,
    )


@pytest.fixture
def signed_encoded():
    """Signed configuration with a base64-encoded source path."""
    return Imgproxy(
        base_url="http://localhost",
        key=KEY_HEX,
        salt=SALT_HEX,
        signature_size=15,
        encode_path=True,
    )


@pytest.fixture
def insecure_plain():
    return Imgproxy(base_url="http://localhost", signature_size=15, encode_path=False)
