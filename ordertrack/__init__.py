"""订单跟踪服务

订单、工艺路线、执行记录、状态历史及分析报表。
"""

__version__ = "1.0.0"
