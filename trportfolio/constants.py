"""Constants shared across the package."""

# Host serving both the REST API and the websocket endpoint.
WEBSOCKET_BASE_HOST = "api.traderepublic.com"

# Base URI of the REST API.
REST_API_BASE_URI = f"https://{WEBSOCKET_BASE_HOST}/api/v1"

# User agent sent with every HTTP request.
HTTP_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
    "AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.4 Safari/605.1.15"
)

# Prefix of the authentication cookies.
COOKIE_NAME_PREFIX = "tr_"

# Seconds between session refreshes that keep the session alive.
SESSION_REFRESH_INTERVAL = 60

# Action type telling that details of a timeline item can be fetched.
RESPONSE_ACTION_TYPE_TIMELINE_DETAIL = "timelineDetail"

# File that transaction entries are exported to.
CSV_FILENAME = "./transactions.csv"

# Directory that transaction documents are downloaded to.
TRANSACTION_DOCUMENTS_BASE_DIR = "./documents/transactions"

# Directory that activity documents are downloaded to.
ACTIVITY_LOG_DOCUMENTS_BASE_DIR = "./documents/activity"