from ui.input_collector import collect_layout, parse_number
