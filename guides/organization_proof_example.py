"""Prove which AWS organization the ambient credentials belong to."""

import logging

from cloudproof import (
    ProofArtifact,
    ProofOptions,
    VerifyOptions,
    new_organization_proof,
    verify_organization_proof,
)
from cloudproof.transports import HttpxTransport


def main():
    logging.basicConfig(level=logging.INFO)

    proof = new_organization_proof(ProofOptions(user_agent="org-proof-example/1.0"))
    wire = proof.to_json()

    transport = HttpxTransport(timeout=5.0)
    try:
        organization = verify_organization_proof(
            ProofArtifact.from_json(wire), VerifyOptions(transport=transport)
        )
    finally:
        transport.close()

    print(f"✅ Organization {organization.id} ({organization.feature_set})")
    print(f"👤 Management account: {organization.main_account_id}")
    for policy_type in organization.available_policy_types:
        print(f"  - {policy_type.type}: {policy_type.status}")


if __name__ == "__main__":
    main()
