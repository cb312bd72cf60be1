"""RSA-PSS signature generation for Kalshi API authentication."""

import base64
from pathlib import Path

from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey


class RsaPssSigner:
    """Handles RSA-PSS signature generation for API requests.

    The Kalshi API requires an RSA-PSS (SHA-256) signature over the
    concatenation of:
    Timestamp + HTTP Method + Request Path (without the query string)
    """

    def __init__(self, private_key: RSAPrivateKey) -> None:
        """Initialize the signer with an RSA private key.

        Args:
            private_key: The RSA private key paired with the API key ID.
        """
        self.private_key = private_key

    def generate_signature(self, timestamp: str, method: str, path: str) -> str:
        """Generate a base64 RSA-PSS signature for an API request.

        Args:
            timestamp: Unix timestamp in milliseconds as string.
            method: HTTP method (GET, POST, etc.).
            path: Full request path from the host root, without query.

        Returns:
            Base64-encoded signature string.
        """
        message = f"{timestamp}{method}{path}".encode()
        signature_bytes = self.private_key.sign(
            message,
            padding.PSS(
                mgf=padding.MGF1(hashes.SHA256()),
                salt_length=padding.PSS.DIGEST_LENGTH,
            ),
            hashes.SHA256(),
        )
        return base64.b64encode(signature_bytes).decode("ascii")

    @staticmethod
    def load_private_key_from_file(key_path: str) -> RSAPrivateKey:
        """Load an RSA private key from a PEM file.

        Args:
            key_path: Path to the PEM-encoded private key file.

        Returns:
            The loaded RSAPrivateKey object.

        Raises:
            FileNotFoundError: If the key file doesn't exist.
            ValueError: If the file doesn't contain a valid RSA key.
        """
        path = Path(key_path)
        if not path.exists():
            raise FileNotFoundError(f"Private key file not found: {key_path}")

        private_key = serialization.load_pem_private_key(path.read_bytes(), password=None)

        if not isinstance(private_key, RSAPrivateKey):
            raise ValueError("The provided key is not an RSA private key")

        return private_key
