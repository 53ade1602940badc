"""Managed database inventories for AWS, Azure, GCP and OCI."""