from .reconciler import Reconciler, reconcile

__all__ = ["Reconciler", "reconcile"]
