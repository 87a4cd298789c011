from farmhub.core.screens import column, number, relation_value, render_rows


def fields_screen(context):
    fields = context.store.fields
    return {
        'title': 'Field Management',
        'columns': [
            column('name', 'Field Name'),
            column('size', 'Size (acres)'),
            column('location', 'Location'),
            column('soil_type', 'Soil Type'),
            column('irrigation', 'Irrigation'),
            column('status', 'Status'),
            column('created_at', 'Created'),
        ],
        'rows': render_rows(fields, lambda row: {
            'irrigation': row.get('irrigation_system') or 'Rain-fed',
        }),
        'summary': {
            'total_fields': len(fields),
            'active_fields': sum(1 for f in fields if f.get('status') == 'active'),
            'total_acreage': round(sum(number(f.get('size')) for f in fields), 1),
            'irrigated_fields': sum(1 for f in fields if f.get('irrigation_system')),
        },
    }


def crops_screen(context):
    crops = context.store.crops
    return {
        'title': 'Crop Management',
        'columns': [
            column('name', 'Crop Name'),
            column('field_name', 'Field'),
            column('area', 'Area (acres)'),
            column('planting_date', 'Planted'),
            column('expected_harvest_date', 'Expected Harvest'),
            column('status', 'Status'),
            column('created_at', 'Created'),
        ],
        'rows': render_rows(crops, lambda row: {
            'field_name': relation_value(row, 'field', 'name', 'No field assigned'),
        }),
        'summary': {
            'total_crops': len(crops),
            'active_crops': sum(1 for c in crops if c.get('status') != 'harvested'),
            'total_area': round(sum(number(c.get('area')) for c in crops), 1),
            'flowering_crops': sum(1 for c in crops if c.get('status') == 'flowering'),
        },
    }
