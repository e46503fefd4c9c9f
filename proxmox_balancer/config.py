# config.py

"""Configuration settings for Proxmox LXC Balancer."""

# API layout
API_PATH = "/api2/json"
DEFAULT_TIMEOUT = 10  # seconds, applied to every request
AUTH_COOKIE_NAME = "PVEAuthCookie"
CSRF_HEADER_NAME = "CSRFPreventionToken"

# Container defaults
DEFAULT_SWAP_MB = 512
DEFAULT_TEMPLATE_BUCKET = "templates"
DEFAULT_ISO_BUCKET = "ISOs"
DEFAULT_BRIDGE = "vmbr3"
DEFAULT_VLAN_TAG = 10

# Status actions accepted by /nodes/{node}/lxc/{vmid}/status/{action}
STATUS_ACTIONS = ("start", "stop", "shutdown", "resume", "suspend")

# Required Proxmox environment variables
REQUIRED_ENV_VARS = [
    'PROXMOX_HOST',
    'PROXMOX_USERNAME',
    'PROXMOX_PASSWORD'
]
VERIFY_SSL_ENV_VAR = 'PROXMOX_VERIFY_SSL'
TIMEOUT_ENV_VAR = 'PROXMOX_TIMEOUT'

# Logging format
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
