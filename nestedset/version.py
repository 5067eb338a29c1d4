"""版本信息"""

__version__ = "0.1.0"
__author__ = "nestedset contributors"
__description__ = "基于嵌套集合（Nested Set）模型的树形结构标号维护库"
