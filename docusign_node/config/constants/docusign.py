"""Constants for the DocuSign eSignature REST API."""

from enum import Enum

API_VERSION = "v2.1"

# Default sign-here placement in pixels from the top-left of the page
DEFAULT_SIGNATURE_X = 100
DEFAULT_SIGNATURE_Y = 700

# Vertical gap between stacked signatures of additional signers
ADDITIONAL_SIGNER_Y_STEP = 50

# Vertical gap between radio buttons of one radio group
RADIO_Y_STEP = 25

DEFAULT_TAB_X = 100
DEFAULT_TAB_Y = 150

DEFAULT_PAGE_SIZE = 100
DEFAULT_FILE_EXTENSION = "pdf"
DEFAULT_FONT_SIZE = "Size12"
DEFAULT_ROLE_NAME = "Signer"
DEFAULT_RADIO_GROUP_NAME = "radioGroup"

DEFAULT_REMINDER_DELAY = 2
DEFAULT_REMINDER_FREQUENCY = 1
DEFAULT_EXPIRE_AFTER = 120
DEFAULT_EXPIRE_WARN = 3

DEFAULT_LOCK_DURATION_SECONDS = 300
MAX_LOCK_DURATION_SECONDS = 1800
DEFAULT_LOCKED_BY_APP = "docusign-node"

EDIT_LOCK_HEADER = "X-DocuSign-Edit"

PDF_MIME_TYPE = "application/pdf"


class Environment(str, Enum):
    PRODUCTION = "production"
    DEMO = "demo"


class Region(str, Enum):
    NA = "na"
    EU = "eu"
    AU = "au"
    CA = "ca"


DEMO_BASE_URL = "https://demo.docusign.net/restapi"

PRODUCTION_BASE_URLS = {
    Region.NA: "https://www.docusign.net/restapi",
    Region.EU: "https://eu.docusign.net/restapi",
    Region.AU: "https://au.docusign.net/restapi",
    Region.CA: "https://ca.docusign.net/restapi",
}

OAUTH_BASE_URLS = {
    Environment.PRODUCTION: "account.docusign.com",
    Environment.DEMO: "account-d.docusign.com",
}


class EnvelopeStatus(str, Enum):
    CREATED = "created"
    SENT = "sent"
    VOIDED = "voided"
    DELETED = "deleted"
