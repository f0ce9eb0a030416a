"""EventCheck package.

Feature modules (participants, dispatch, checkin, stats) each carry a model,
a repository contract, a MySQL repository and a service, with a thin Flask
controller layer on top.
"""
