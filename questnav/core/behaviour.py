#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
组件生命周期

Behaviour定义start/update/stop三个钩子，由run_behaviour按帧调用
"""

import logging
import time

logger = logging.getLogger(__name__)


class Behaviour(object):
    '''带生命周期钩子的组件基类'''

    def start(self):
        '''初始化，只调用一次'''
        pass

    def update(self):
        '''每帧调用'''
        pass

    def stop(self):
        '''释放资源'''
        pass


def run_behaviour(behaviour, max_ticks=None, interval=0.0, on_tick=None):
    """
    运行组件主循环

    参数:
        behaviour: Behaviour实例
        max_ticks: 最大帧数，None表示一直运行
        interval: 每帧之间的等待时间(秒)
        on_tick: 每帧update之后的回调 on_tick(tick)，返回False时结束循环

    返回:
        实际运行的帧数
    """
    tick = 0
    try:
        behaviour.start()
        while max_ticks is None or tick < max_ticks:
            behaviour.update()
            tick += 1
            if on_tick is not None and on_tick(tick) is False:
                break
            if interval > 0:
                time.sleep(interval)
    except KeyboardInterrupt:
        logger.info("收到中断信号, 停止运行")
    finally:
        behaviour.stop()
    logger.info(f"运行结束, 共 {tick} 帧")
    return tick
