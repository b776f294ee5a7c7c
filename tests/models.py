from django.db import models

from rail_documents.denormalization import DocumentManager
from rail_documents.filtering import FilteredDocumentMixin


class Address(models.Model):
    city = models.CharField(max_length=120)
    street = models.CharField(max_length=200, blank=True)
    postal_code = models.CharField(max_length=20, blank=True)

    objects = DocumentManager()

    class Meta:
        app_label = "tests"
        verbose_name_plural = "addresses"


class Ticket(models.Model):
    title = models.CharField(max_length=200)
    internal_note = models.TextField(blank=True)

    class Meta:
        app_label = "tests"


class BankAccount(models.Model):
    iban = models.CharField(max_length=34)

    class Meta:
        app_label = "tests"


class Member(FilteredDocumentMixin, models.Model):
    name = models.CharField(max_length=120)
    fb = models.JSONField(default=dict, blank=True)
    address = models.ForeignKey(
        Address, null=True, blank=True, on_delete=models.SET_NULL, related_name="members"
    )
    bankaccount = models.ForeignKey(
        BankAccount, null=True, blank=True, on_delete=models.SET_NULL
    )
    tickets = models.ManyToManyField(Ticket, blank=True, related_name="members")
    write_only_field = models.CharField(max_length=120, blank=True)
    read_only_field = models.CharField(max_length=120, blank=True)

    objects = DocumentManager()

    class Meta:
        app_label = "tests"
