"""
有序树系统基本使用示例
"""
import sys
import os

# 添加src到路径
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from fish_tree import FishTreeSystem, TreeNode
from fish_tree.exceptions import InvalidArgumentError, IndexOutOfRangeError


def main():
    """主函数"""
    print("=" * 60)
    print("有序树系统 - 基本使用示例")
    print("=" * 60)

    # 1. 创建系统实例
    print("\n1. 初始化系统...")
    system = FishTreeSystem({"log_level": "INFO", "max_tree_depth": 5})

    # 2. 创建树
    print("\n2. 创建树...")
    root = system.create_tree("ocean", "red_fish", description="示例树")
    print(f"   根节点: {root}")

    # 3. 添加节点
    print("\n3. 构建树结构...")
    one = system.add_node("ocean", root.node_id, "one_fish")
    two = system.add_node("ocean", root.node_id, "two_fish", "first", "second")
    system.add_node("ocean", one.node_id, "blue_fish")
    for node in system.get_tree("ocean").traverse():
        print(f"   {'  ' * node.get_depth()}- {node.node_id} ({node.variant})")

    # 4. 参数不足的变体
    print("\n4. 参数不足的 two_fish...")
    try:
        system.add_node("ocean", root.node_id, "two_fish", "only_one")
    except InvalidArgumentError as e:
        print(f"   {e}")

    # 5. 越界替换
    print("\n5. 越界替换...")
    try:
        root.replace_child_at(TreeNode(), 5)
    except IndexOutOfRangeError as e:
        print(f"   {e}")

    # 6. 销毁节点
    print("\n6. 销毁节点...")
    orphans = system.destroy_node("ocean", one.node_id)
    print(f"   {one.node_id} 已销毁: {one.is_destroyed()}, 孤儿节点: {[n.node_id for n in orphans]}")
    print(f"   根节点子节点: {[n.node_id for n in root.get_children()]}")
    print(f"   {two.node_id} 的父节点: {two.get_parent().node_id}")

    # 7. 导出
    print("\n7. 导出树结构...")
    print(system.export_tree("ocean").to_string(index=False))


if __name__ == "__main__":
    main()
