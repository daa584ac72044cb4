"""
pytest配置文件
用于设置测试环境和共享fixtures
"""
import sys
import os

import pytest

# 将src目录添加到Python路径
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from fish_tree.core.node.entity import TreeNode


@pytest.fixture
def root():
    return TreeNode(node_id="R")


@pytest.fixture
def a():
    return TreeNode(node_id="A")


@pytest.fixture
def b():
    return TreeNode(node_id="B")


@pytest.fixture
def c():
    return TreeNode(node_id="C")
