from farmhub.core.screens import column, count_by, render_rows


def livestock_screen(context):
    animals = context.store.livestock
    by_type = count_by(animals, 'type')
    return {
        'title': 'Livestock Management',
        'columns': [
            column('tag', 'Tag'),
            column('breed', 'Breed'),
            column('gender', 'Gender'),
            column('weight_display', 'Weight'),
            column('health_status', 'Health Status'),
            column('date_of_birth_display', 'Date of Birth'),
            column('reproduction_display', 'Reproduction'),
        ],
        'rows': render_rows(animals, lambda row: {
            'weight_display': f"{row['weight']} kg" if row.get('weight') else 'Not recorded',
            'date_of_birth_display': row.get('date_of_birth') or 'Unknown',
            'reproduction_display': row.get('reproduction_status') or 'None',
        }),
        'summary': {
            'total_animals': len(animals),
            'healthy': sum(1 for a in animals if a.get('health_status') == 'healthy'),
            'sick': sum(1 for a in animals if a.get('health_status') == 'sick'),
            'animal_types': len(by_type),
            'by_type': by_type,
        },
    }
