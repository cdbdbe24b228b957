"""Attendance & identity-verification store.

Feature modules (catalogs, persons, employees, attendance, auth) each carry a
model, a repository protocol with MySQL and in-memory implementations, a
service and a thin Flask controller. The ``auth`` module owns the
``auth_users`` projection and the write-through sync that keeps it aligned
with the employee store.
"""
