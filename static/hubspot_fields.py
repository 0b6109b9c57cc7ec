CONTACT_PROPERTIES = [
    "firstname",
    "lastname",
    "email",
    "phone",
    "address",
    "jobtitle",
    "company",
]

DEAL_PROPERTIES = [
    "dealname",
    "amount",
    "dealstage",
    "closedate",
    "pipeline",
]

LIST_PAGE_SIZE = 50

# HubSpot-defined "deal to contact" association type. If HubSpot renumbers it,
# created deals get linked with the wrong label.
DEAL_TO_CONTACT_ASSOCIATION = {
    "associationCategory": "HUBSPOT_DEFINED",
    "associationTypeId": 3,
}
