"""
Ingress Redirect Checker - audits NGINX redirect annotations on Kubernetes.

Lists every Ingress in the cluster, extracts the ``rewrite ... redirect;``
directives from their configuration snippets, and reports redirect
targets that are no longer reachable.
"""

__version__ = "0.1.0"
