from src.service.quoting import quote_from_form_dict

# Wizard payloads as the form sends them (all numbers as text)
example_forms = {
    "personal third-party, annual": {
        "vehicleType": {"type": "personal"},
        "vehicle": {"make": "Toyota", "model": "Corolla", "year": "2018", "sumInsured": "100000"},
        "owner": {"age": "30", "licenseYears": "5", "claims": "no", "claimFreeYears": "0"},
        "coverage": {"type": "third-party-only", "period": "annual"},
    },
    "young taxi driver with claims, quarterly": {
        "vehicleType": {"type": "taxi"},
        "vehicle": {"make": "Toyota", "model": "Sienta", "year": "2015", "sumInsured": "50000"},
        "owner": {"age": "19", "licenseYears": "1", "claims": "yes", "previousClaims": "2"},
        "coverage": {"type": "third-party-fire-theft", "period": "quarterly"},
    },
}

for name, form in example_forms.items():
    print(name)
    print(quote_from_form_dict(form))
