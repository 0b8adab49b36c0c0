"""Constants for the Yeelight LAN control protocol."""

DEFAULT_PORT = 55443
DEFAULT_TIMEOUT = 3.0
DEFAULT_SMOOTH = 200
MIN_SMOOTH = 30

LINE_TERMINATOR = b"\r\n"

KEY_ID = "id"
KEY_METHOD = "method"
KEY_PARAMS = "params"
KEY_RESULT = "result"
KEY_ERROR = "error"
KEY_MODE = "mode"

KEY_SMOOTH = "smooth"
KEY_SUDDEN = "sudden"

KEY_ON = "on"
KEY_OFF = "off"

# Methods
METHOD_GET_PROP = "get_prop"
METHOD_SET_RGB = "set_rgb"
METHOD_SET_BRIGHT = "set_bright"
METHOD_SET_CT_ABX = "set_ct_abx"
METHOD_SET_POWER = "set_power"
METHOD_TOGGLE = "toggle"
METHOD_CRON_ADD = "cron_add"
METHOD_UPDATE_LEDS = "update_leds"
METHOD_ACTIVATE_FX_MODE = "activate_fx_mode"

# Properties
PROP_POWER = "power"
PROP_BRIGHT = "bright"
PROP_RGB = "rgb"
PROP_CT = "ct"

# Cron job types
CRON_TYPE_POWER_OFF = 0

# Ranges accepted by the device
BRIGHT_MIN = 1
BRIGHT_MAX = 100
CT_MIN = 1700
CT_MAX = 6500
