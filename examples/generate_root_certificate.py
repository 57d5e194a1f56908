#!/usr/bin/env python3
import logging
import sys
from datetime import date
from pathlib import Path

from pyselfca import CertificateOptions, PKIError, RootAuthority, SubjectOptions


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    logger = logging.getLogger("pyselfca.example")

    options = CertificateOptions(
        expiry_on=date(2030, 1, 2),
        bits=4096,
        subject=SubjectOptions(
            common_name="api.example.com.br",
            country_name="BR",
            state_or_province_name="MT",
            locality_name="Primavera do Leste",
            organization_name="Example ME",
            organizational_unit_name="IT",
        ),
    )

    try:
        root = RootAuthority.generate(options)
    except PKIError as e:
        logger.error(f"Failed to generate the root certificate: {e}")
        sys.exit(1)

    print(root.to_pem_bundle().certificate)
    root.persist(Path(__file__).parent, "server")


if __name__ == "__main__":
    main()
