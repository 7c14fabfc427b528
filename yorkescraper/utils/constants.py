"""
Constants describing the Yorke Peninsula Council development register.

Selectors and URL templates live here so a markup change on the register only
needs an update in this module.
"""

REGISTER_BASE_URL = "https://yorke.sa.gov.au/development/development-information/development-register/"

# {page}, {date_from} and {date_to} are substituted; dates are URL-encoded DD/MM/YYYY.
LISTING_URL_TEMPLATE = (
    REGISTER_BASE_URL
    + "?pagenum={page}&gv_search=&filter_1=&filter_3=&gv_start={date_from}&gv_end={date_to}&filter_7=&mode=all"
)

# {application_number} is substituted URL-encoded.
INFORMATION_URL_TEMPLATE = (
    REGISTER_BASE_URL
    + "?gv_search=&filter_1={application_number}&filter_3=&gv_start=&gv_end=&filter_7=&mode=all"
)

COMMENT_URL = "mailto:admin@yorke.sa.gov.au"

# Search results page
LISTING_ROW_SELECTOR = "table.gv-table-view tr"
LISTING_LINK_SELECTOR = "#gv-field-31-1 a"
LISTING_ADDRESS_SELECTOR = "#gv-field-31-7"
NEXT_PAGE_SELECTOR = "ul.page-numbers li a.next"

# Application detail page
DETAIL_ROW_SELECTOR = "table.gv-table-view-content tr"
DETAIL_KEY_APPLICATION_NUMBER = "DA NUMBER"
DETAIL_KEY_RECEIVED_DATE = "DATE APPLICATION RECEIVED"
DETAIL_KEY_DESCRIPTION = "DEVELOPMENT DETAILS"

# Register dates are day/month/year; the day may omit its leading zero.
REGISTER_DATE_FORMAT = "%d/%m/%Y"
