"""Protobuf messages and service stubs for ``catalog.v1``.

The ``.proto`` file is compiled at import time by ``grpc_tools`` (via
``grpc.protos_and_services``), so no generated ``*_pb2.py`` files are kept in
the tree. The proto directory has to be importable for the runtime compiler
to locate the file.
"""

from __future__ import annotations

import os
import sys

import grpc

PROTO_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "protos")
PROTO_FILE = "catalog.proto"
PACKAGE = "catalog.v1"

if PROTO_DIR not in sys.path:
    sys.path.append(PROTO_DIR)

catalog_pb2, catalog_pb2_grpc = grpc.protos_and_services(PROTO_FILE)

USER_SERVICE = f"{PACKAGE}.UserService"
PRODUCT_SERVICE = f"{PACKAGE}.ProductService"
