import pytest
import datetime
from cryptography import x509
from cryptography.x509.oid import NameOID
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec

from pyselfca import CertificateOptions, ClientCertificateIssuer, RootAuthority, SubjectOptions
from pyselfca.keys import generate_key_pair

@pytest.fixture(scope="session")
def key_pair():
    """A 2048-bit key pair shared by tests that only need some RSA key."""
    return generate_key_pair(2048)

@pytest.fixture(scope="session")
def other_key_pair():
    return generate_key_pair(2048)

@pytest.fixture(scope="session")
def ec_private_key():
    return ec.generate_private_key(ec.SECP256R1())

@pytest.fixture(scope="session")
def root_authority():
    """A freshly generated 2048-bit root authority."""
    options = CertificateOptions(
        bits=2048,
        subject=SubjectOptions(
            common_name="ca.example.com",
            country_name="BR",
            state_or_province_name="MT",
            locality_name="Primavera do Leste",
            organization_name="Example CA",
            organizational_unit_name="IT",
        ),
    )
    return RootAuthority.generate(options)

@pytest.fixture(scope="session")
def issued_certificate(root_authority):
    options = CertificateOptions(
        bits=2048,
        subject=SubjectOptions(common_name="client.example.com"),
    )
    return ClientCertificateIssuer().issue(options, root_authority)

@pytest.fixture(scope="session")
def self_signed_leaf(other_key_pair):
    """A self-signed certificate without basicConstraints, i.e. not a CA."""
    private_key = other_key_pair.private_key
    subject = issuer = x509.Name([
        x509.NameAttribute(NameOID.COMMON_NAME, u"not-a-ca.example.com"),
    ])
    cert = x509.CertificateBuilder().subject_name(
        subject
    ).issuer_name(
        issuer
    ).public_key(
        private_key.public_key()
    ).serial_number(
        x509.random_serial_number()
    ).not_valid_before(
        datetime.datetime.now(datetime.timezone.utc) - datetime.timedelta(days=1)
    ).not_valid_after(
        datetime.datetime.now(datetime.timezone.utc) + datetime.timedelta(days=30)
    ).sign(private_key, hashes.SHA256())
    return cert, private_key

@pytest.fixture(scope="session")
def ec_self_signed_ca(ec_private_key):
    """A self-signed CA certificate whose key is EC rather than RSA."""
    subject = issuer = x509.Name([
        x509.NameAttribute(NameOID.COMMON_NAME, u"ec-ca.example.com"),
    ])
    cert = x509.CertificateBuilder().subject_name(
        subject
    ).issuer_name(
        issuer
    ).public_key(
        ec_private_key.public_key()
    ).serial_number(
        x509.random_serial_number()
    ).not_valid_before(
        datetime.datetime.now(datetime.timezone.utc) - datetime.timedelta(days=1)
    ).not_valid_after(
        datetime.datetime.now(datetime.timezone.utc) + datetime.timedelta(days=30)
    ).add_extension(
        x509.BasicConstraints(ca=True, path_length=None), critical=True,
    ).sign(ec_private_key, hashes.SHA256())
    return cert, ec_private_key
