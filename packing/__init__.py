from packing.engine import place, validate_inputs, calculate_sheet_efficiency, find_overlaps
