#!/usr/bin/env python3
import logging
import socket
import sys
from pathlib import Path

from pyselfca import (
    CLIENT_DEFAULTS,
    CertificateOptions,
    ClientCertificateIssuer,
    PKIError,
    load_root_authority_from_pem_files,
)


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    logger = logging.getLogger("pyselfca.example")
    folder = Path(__file__).parent

    try:
        root = load_root_authority_from_pem_files(
            folder / "server.cert",
            folder / "server.key",
            folder / "server.pub.key",
        )
        # The host name is resolved here, by the caller, and passed in explicitly.
        issuer = ClientCertificateIssuer(CLIENT_DEFAULTS.with_common_name(socket.gethostname()))
        issued = issuer.issue(CertificateOptions(bits=2048), root)
    except PKIError as e:
        logger.error(f"Failed to issue the client certificate: {e}")
        sys.exit(1)

    logger.info(f"Subject: {issued.info.subject}")
    logger.info(f"Issuer: {issued.info.issuer}")
    logger.info(f"Valid until: {issued.expiry_on}")
    issued.persist(folder, "client")


if __name__ == "__main__":
    main()
