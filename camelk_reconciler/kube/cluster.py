"""ObjectStore adapter for a live Kubernetes cluster.

Wraps the official ``kubernetes`` client. HTTP 404 responses become
NotFoundError; any other API error propagates so that the owning
reconciler can retry.
"""

from __future__ import annotations

import logging
from typing import Any

from kubernetes import client, config
from kubernetes.client.rest import ApiException

from camelk_reconciler.errors import NotFoundError
from camelk_reconciler.kube.models import KINDS, KubeObject

logger = logging.getLogger(__name__)


class KubernetesObjectStore:
    """Read pods and config maps from a Kubernetes cluster."""

    def __init__(self, api_client: client.ApiClient | None = None) -> None:
        self.api_client = api_client or client.ApiClient()
        self.core_v1 = client.CoreV1Api(self.api_client)
        self.apps_v1 = client.AppsV1Api(self.api_client)

    @classmethod
    def connect(cls, in_cluster: bool = False) -> KubernetesObjectStore:
        """Load cluster credentials and create a store.

        Args:
            in_cluster: Use the service account of the current pod instead
                of the local kubeconfig.

        Returns:
            Connected KubernetesObjectStore.
        """
        if in_cluster:
            config.load_incluster_config()
        else:
            config.load_kube_config()
        logger.info("Connected to Kubernetes (in_cluster=%s)", in_cluster)
        return cls()

    def _read(self, kind: str, namespace: str, name: str) -> Any:
        if kind == "Pod":
            return self.core_v1.read_namespaced_pod(name, namespace)
        if kind == "ConfigMap":
            return self.core_v1.read_namespaced_config_map(name, namespace)
        if kind == "Service":
            return self.core_v1.read_namespaced_service(name, namespace)
        if kind == "Deployment":
            return self.apps_v1.read_namespaced_deployment(name, namespace)
        raise ValueError(f"Unsupported kind: {kind}")

    def get(self, kind: str, namespace: str, name: str) -> KubeObject:
        try:
            raw = self._read(kind, namespace, name)
        except ApiException as e:
            if e.status == 404:
                raise NotFoundError(kind, namespace, name) from e
            logger.error("Failed to read %s %s/%s: %s", kind, namespace, name, e)
            raise

        data = self.api_client.sanitize_for_serialization(raw)
        return KINDS[kind].model_validate(data)  # type: ignore[return-value]


__all__ = ["KubernetesObjectStore"]
