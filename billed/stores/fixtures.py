"""Seed bills for the in-memory store, in wire format."""

RECEIPT_HOST = "https://test.storage.tld/v0/b/billable-677b6.appspot.com/o"

FIXTURE_BILLS = [
    {
        "id": "47qAXb6fIm2zOKkLzMro",
        "employeeEmail": "a@a",
        "type": "Hôtel et logement",
        "name": "encore",
        "amount": 400,
        "date": "2004-04-04",
        "vat": 80,
        "pct": 20,
        "commentary": "séminaire billed",
        "commentAdmin": "ok",
        "fileUrl": f"{RECEIPT_HOST}/justificatifs%2Fpreview-facture-free-201801-pdf-1.jpg?alt=media",
        "fileName": "preview-facture-free-201801-pdf-1.jpg",
        "status": "pending",
    },
    {
        "id": "BeKy5Mo4jkmdfPGYpTxZ",
        "employeeEmail": "a@a",
        "type": "Transports",
        "name": "test1",
        "amount": 100,
        "date": "2001-01-01",
        "vat": "",
        "pct": 20,
        "commentary": "plop",
        "commentAdmin": "en fait non",
        "fileUrl": f"{RECEIPT_HOST}/justificatifs%2F1592770761.jpeg?alt=media",
        "fileName": "1592770761.jpeg",
        "status": "refused",
    },
    {
        "id": "UIUZtnPQvnbFnB0ozvJh",
        "employeeEmail": "a@a",
        "type": "Services en ligne",
        "name": "test3",
        "amount": 300,
        "date": "2003-03-03",
        "vat": 60,
        "pct": 20,
        "commentary": "",
        "commentAdmin": "bon bah d'accord",
        "fileUrl": f"{RECEIPT_HOST}/justificatifs%2Ffacture-client-php-exportee.png?alt=media",
        "fileName": "facture-client-php-exportee.png",
        "status": "accepted",
    },
    {
        "id": "qcCK3SzECmaZAGRrHjaC",
        "employeeEmail": "a@a",
        "type": "Restaurants et bars",
        "name": "test2",
        "amount": 200,
        "date": "2002-02-02",
        "vat": 40,
        "pct": 20,
        "commentary": "test2",
        "commentAdmin": "pas la bonne facture",
        "fileUrl": f"{RECEIPT_HOST}/justificatifs%2Fpreview-facture-free-201801-pdf-1.jpg?alt=media",
        "fileName": "preview-facture-free-201801-pdf-1.jpg",
        "status": "refused",
    },
]
