"""Fixed protocol values shared by the signing and verification sides."""

DEFAULT_USER_AGENT = "cloudproof-python/0.1.0"
DEFAULT_REGION = "us-east-1"

SIGV4_ALGORITHM = "AWS4-HMAC-SHA256"
SIGV4_TERMINATOR = "aws4_request"

# Format of the X-Amz-Date header.
AMZ_DATE_FORMAT = "%Y%m%dT%H%M%SZ"

AMZ_DATE_HEADER = "X-Amz-Date"
SECURITY_TOKEN_HEADER = "X-Amz-Security-Token"
AUTHORIZATION_HEADER = "Authorization"
