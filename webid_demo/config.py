"""
webid_demo configuration. Secrets (client secret, session secret) come from env only.
Base URL is runtime state (CLI flag), see main.create_app.
"""
import os

# Google OAuth client (registered in Google Cloud console)
GOOGLE_CLIENT_ID = os.environ.get("GOOGLE_CLIENT_ID", "")
GOOGLE_CLIENT_SECRET = os.environ.get("GOOGLE_CLIENT_SECRET", "")

# Fixed Google endpoints; in real life these come from the discovery document
GOOGLE_AUTH_ENDPOINT = os.environ.get("GOOGLE_AUTH_ENDPOINT", "https://accounts.google.com/o/oauth2/v2/auth")
GOOGLE_TOKEN_ENDPOINT = os.environ.get("GOOGLE_TOKEN_ENDPOINT", "https://www.googleapis.com/oauth2/v4/token")
GOOGLE_JWKS_URI = os.environ.get("GOOGLE_JWKS_URI", "https://www.googleapis.com/oauth2/v3/certs")
GOOGLE_ISSUERS = ("https://accounts.google.com", "accounts.google.com")

GOOGLE_SCOPE = "openid email"

# Off by default: the id_token is trusted as received from the token endpoint
GOOGLE_VERIFY_ID_TOKEN = os.environ.get("GOOGLE_VERIFY_ID_TOKEN", "").lower() in ("1", "true", "yes")

# Signs the session cookie; override in any shared deployment
SESSION_SECRET = os.environ.get("SESSION_SECRET", "dev-session-secret-change-me")
SESSION_COOKIE_NAME = "webid_session"

AWS_REGION = os.environ.get("AWS_REGION", "us-east-1")
AWS_S3_BUCKET_NAME = os.environ.get("AWS_S3_BUCKET_NAME", "aws-webid-demo")

# Role trusted for accounts.google.com web identities
AWS_ROLE_ARN = os.environ.get("AWS_ROLE_ARN", "arn:aws:iam::808510826174:role/WebIdDemoOneGoogleUser")
AWS_ROLE_SESSION_NAME = os.environ.get("AWS_ROLE_SESSION_NAME", "aws-webid-demo")
AWS_ROLE_DURATION_SECONDS = 3600

# Token endpoint call timeout (seconds)
HTTP_TIMEOUT = 10.0

DEFAULT_PORT = 8080
DEFAULT_BASE_URL = "localhost:$port"
