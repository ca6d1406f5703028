"""Adapter package for the SDK's transport-facing layer.

Purpose:
    Hold the unified error family, the response classifier, and the
    collaborators that feed it (header validation, XML codec, HTTP session).

Dependencies:
    ``http_client`` depends on ``requests``; ``headers`` and ``api_errors``
    use ``requests.exceptions`` for the transport exception family. The XML
    codec uses ``xml.etree.ElementTree``.

Call context:
    Imported by bucket/object operation modules and by tests (with stub
    sessions for transport-level behavior verification).
"""
