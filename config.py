"""
Game configuration.

Plain module-level constants shared by the engine (size presets, random
fill floor) and the pygame front-end (window layout, colours, input).
"""

# ============================ Engine ============================
SIZE_PRESETS = {
    "SMALL": 5,
    "MEDIUM": 10,
    "LARGE": 15,
}
DEFAULT_SIZE = "SMALL"

# 랜덤 퍼즐의 최소 채움 칸 수
MIN_RANDOM_FILL = 5

# ============================ Window ============================
title = "Picross"
fps = 30

cell_size = 32
hint_cell_size = 18
margin_right = 20
margin_bottom = 20
header_height = 44

# Filled in by run.Game from the current board size
margin_left = 0
margin_top = 0
width = 480
height = 480
display_dimension = (width, height)

# ============================ Fonts ============================
font_name = None
font_size = 22
hint_font_size = 16
header_font_size = 22
result_font_size = 48

# ============================ Colours ============================
color_bg = (245, 245, 240)
color_grid = (120, 120, 120)
color_grid_major = (40, 40, 40)
color_cell_empty = (255, 255, 255)
color_cell_filled = (40, 40, 60)
color_flag = (200, 60, 60)
color_header = (60, 60, 80)
color_header_text = (240, 240, 240)
color_hint = (30, 30, 30)
color_hint_used = (170, 170, 170)
color_text = (20, 20, 20)
color_menu_item = (60, 60, 120)
color_result = (255, 255, 255)
result_overlay_alpha = 140

# ============================ Input ============================
mouse_left = 1
mouse_middle = 2
mouse_right = 3
