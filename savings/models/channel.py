from django.db import models

DEPOSIT_MODES = [
    ("Cash", "Cash"),
    ("Bank", "Bank"),
    ("Wallet", "Wallet"),
]


class PaymentChannel(models.Model):
    """
    How money reached the association. Bank and wallet deposits usually
    carry the provider name, a reference and a link to the evidence.
    """
    deposit_mode = models.CharField(max_length=10, choices=DEPOSIT_MODES, null=True, blank=True)
    source_name = models.CharField(max_length=150, null=True, blank=True)
    transaction_reference = models.CharField(max_length=150, null=True, blank=True)
    evidence_url = models.CharField(max_length=500, null=True, blank=True)

    class Meta:
        abstract = True

    def has_payment_details(self):
        return any([self.source_name, self.transaction_reference, self.evidence_url])
