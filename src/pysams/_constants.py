"""Internal constants shared across the library."""

DEFAULT_ORIGIN = "http://127.0.0.1:8080"

WS_PATH = "/ws"
CONFIG_ENDPOINT = "/api/config"
START_ENDPOINT = "/api/start"
STOP_ENDPOINT = "/api/stop"
STATUS_ENDPOINT = "/api/status"

#: Fixed delay between a channel close and the next connection attempt.
#: There is no backoff growth and no retry cap.
RECONNECT_DELAY_SECONDS = 5.0
REQUEST_TIMEOUT_SECONDS = 10.0

RUNNING_STATUS = "running"
IDLE_STEP = "idle"
ORDER_SUCCESS_STEP = "order_success"
