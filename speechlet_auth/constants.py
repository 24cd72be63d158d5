"""Fixed protocol values for Alexa speechlet request signatures.

None of these are configurable: they define which certificates and
signatures the verifier is willing to trust.
"""

# Request headers carrying the signature and the certificate location
SIGNATURE_REQUEST_HEADER = "Signature"
SIGNATURE_CERT_URL_REQUEST_HEADER = "SignatureCertChainUrl"

# Trust-anchor policy for certificate URLs
CERT_URL_SCHEME = "https"
CERT_URL_HOST = "s3.amazonaws.com"
CERT_URL_PATH_SEGMENT = "/echo.api/echo-api-cert"
CERT_URL_PORT = 443

# Identity the signing certificate must carry as a subject alternative name
ECHO_API_DOMAIN_NAME = "echo-api.amazon.com"

SIGNATURE_ALGORITHM = "SHA1withRSA"

CERT_CACHE_KEY_PREFIX = "AlexaAppKit_" + SIGNATURE_CERT_URL_REQUEST_HEADER
CERT_CACHE_TTL = 24 * 60 * 60

DEFAULT_FETCH_TIMEOUT = 10.0
