"""Confluence settings and REST client."""