"""Create an identity proof and verify it straight away.

Normally the proof would be sent to another service, which runs the verify
step on its side.
"""

from cloudproof import ProofArtifact, new_identity_proof, verify_identity_proof


def main():
    # Claimant: sign GetCallerIdentity with the ambient AWS credentials
    proof = new_identity_proof()
    wire = proof.to_json()
    print(f"📝 Proof: {wire}")

    # Verifier: replay the proof against STS
    identity = verify_identity_proof(ProofArtifact.from_json(wire))
    print(f"✅ Verified account ID is: {identity.account}")
    print(f"🔗 ARN: {identity.arn}")


if __name__ == "__main__":
    main()
