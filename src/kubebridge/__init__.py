"""kubebridge - redirect a Kubernetes workload to your local machine."""

__version__ = "0.1.0"

PRODUCT_NAME = "Kubernetes Bridge"
